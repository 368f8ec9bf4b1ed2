from setuptools import setup, find_packages

setup(
    name="keysuggest",
    version="0.1.0",
    description="Tiered word suggestion and spell checking engine for software keyboards",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    install_requires=[
        "requests",
        "pyspellchecker",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "keysuggest=keysuggest.main:main",
        ],
    },
    package_data={
        "keysuggest": [
            "resources/*",
        ],
    },
    include_package_data=True,
)
