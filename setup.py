from setuptools import setup, find_packages

version = {}
with open("clasp/version.py", encoding="UTF-8") as f:
    exec(f.read(), version)

setup(
    name="clasp",
    version=version["__version__"],
    description="Reflection-driven command-line argument parser with an interactive loop.",
    long_description=open("README.md", encoding="UTF-8").read(),
    long_description_content_type="text/markdown",
    author="Roland Thomas Jr",
    author_email="roland@rtj.dev",
    packages=find_packages(exclude=("tests", "tests.*", "examples")),
    python_requires=">=3.10",
    install_requires=[
        "rich>=13",
        "prompt_toolkit>=3.0.44",
        "pydantic>=2",
        "python-dateutil>=2.8",
        "pyyaml>=6",
        "toml>=0.10",
        "python-json-logger>=3.1",
    ],
    extras_require={
        "test": ["pytest>=7", "pytest-asyncio>=0.21"],
    },
    entry_points={
        "console_scripts": ["clasp=clasp.__main__:main"],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Development Status :: 3 - Alpha",
    ],
)
