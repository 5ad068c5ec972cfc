from setuptools import setup, find_packages

setup(
    name="wavepaddle",
    version="0.1.0",
    packages=find_packages(exclude=["test", "test.*", "scripts"]),
    install_requires=[
        "numpy",
        "scipy",
        "pandas",
        "plotly",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    author="",
    author_email="",
    description="JONSWAP spectrum binning and wavemaker paddle stroke computation",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.7",
    include_package_data=True,
)
