from setuptools import find_packages, setup

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="theme-extractor",
    version="0.2.0",
    author="theme-extractor Developers",
    description="IDE color scheme parser and colored value renderer",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["theme_extractor", "theme_extractor.*"]),
    include_package_data=True,
    install_requires=[
        "rich >= 13.0",
    ],
    extras_require={
        "dev": [
            "pytest >= 7.0",
            "pytest-cov >= 5.0",
            "hypothesis >= 6.0",
            "flake8 >= 7.0",
            "black >= 24.0",
            "isort >= 5.13",
        ],
        "test": [
            "pytest >= 7.0",
            "pytest-cov >= 5.0",
            "hypothesis >= 6.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "theme-extractor=theme_extractor:cli",
        ],
    },
    python_requires=">=3.10",
    classifiers=[
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
)
