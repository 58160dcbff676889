from setuptools import setup, find_packages

setup(
    name="triadc",
    version="0.1.0",
    description="triadc: translates assignment statements into triads and rebuilds their expression trees",
    long_description=open("README.md", encoding="utf-8").read(),
    long_description_content_type="text/markdown",
    author="triadc Project",
    python_requires=">=3.9",
    packages=find_packages(),
    entry_points={
        "console_scripts": [
            "triadc=triadc.cli:main",
        ],
    },
    extras_require={
        "test": ["pytest"],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Topic :: Software Development :: Compilers",
    ],
)
