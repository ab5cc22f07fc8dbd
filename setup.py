from setuptools import setup, find_packages

setup(
    name="warntrace",
    version="0.1.0",
    description="Leveled, call-stack-aware diagnostics for terminals",
    long_description=open("README.md", encoding="UTF-8").read(),
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers = [
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.9",
    install_requires = ["html5tagger>=1.2.1"],
    extras_require = {"test": ["pytest", "coverage"]},
    package_data = {"warntrace": ["style.css"]},
    include_package_data = True,
)
