from setuptools import setup, find_packages

setup(
    name="androidutils",  # Package name
    version="0.1.0",  # Version number
    description="Static helpers for Python apps on Android: stream copy, task dispatch, HTTP and platform queries.",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "requests",
        "python-dotenv",
        "pydantic>=2",
    ],
    extras_require={
        "test": ["pytest"],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: Apache Software License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.8",
)
