from setuptools import find_packages, setup

setup(
    name="ss12000client",
    package_dir={"": "src"},
    packages=find_packages("src"),
    version="0.1.0",
    license="MIT",
    long_description="",
    long_description_content_type="text/markdown",
    description="An asynchronous wrapper over SS12000 school data API:s",
    keywords=["SS12000", "school data", "API Wrapper"],
    python_requires=">=3.10",
    install_requires=["httpx"],
    extras_require={
        "orjson": ["orjson"],
        "test": ["pytest", "pytest-asyncio"],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Framework :: AsyncIO",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
    ],
)
