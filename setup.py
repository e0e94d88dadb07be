# setup.py
from setuptools import setup, find_packages

setup(
    name="package-bundler",
    version="0.1.0",
    description="Bundle trees of named, typed text files into a single markered artifact and back",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.9",
    install_requires=[
        "zstandard",  # Alternative compression codec
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'package-bundler=package_bundler.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
