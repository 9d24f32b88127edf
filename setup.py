import pathlib

import setuptools

here = pathlib.Path(__file__).parent.resolve()

long_description = (here / "README.md").read_text(encoding="utf-8")

setuptools.setup(
    name="vechain-tx",
    version="0.3.0",
    description="Encoding and signing of VeChainThor transactions",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="MIT",
    classifiers=[
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "License :: OSI Approved :: MIT License",
    ],
    package_dir={"": "src"},
    packages=setuptools.find_packages("src"),
    python_requires=">=3.10",
    install_requires=[
        "ethereum-types>=0.2.1,<0.3",
        "ethereum-rlp>=0.1.1,<0.2",
        "pycryptodome>=3.22,<4",
        "coincurve>=20,<22",
        "pydantic>=2.10,<3",
        "PyYAML>=6.0.2,<7",
        "requests>=2.31,<3",
    ],
    extras_require={
        "test": [
            "pytest>=8,<9",
        ],
    },
)
