from setuptools import setup, find_namespace_packages

with open("README.md", "r") as fh:
    long_description = fh.read()

setup(
    name="dayahead-price-generators",
    version="0.1.0",
    author="S.J.Hoeksma",
    author_email="sjhoeksma@gmail.com",
    description="Pluggable day-ahead energy price generators",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/sjhoeksma/dayahead-price-generators",
    packages=find_namespace_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "numpy>=1.21.0",
        "pandas>=1.5.0",
        "python-dateutil>=2.8.0",
        "pytz>=2024.1",
        "scikit-learn>=1.2.0",
        "joblib>=1.2.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=2.0.0",
            "black>=21.0.0",
            "isort>=5.0.0",
        ]
    },
    python_requires=">=3.11",
)
