# setup.py

from setuptools import setup, find_packages

setup(
    name="weed-tracker",
    version="0.1.0",
    description="Multi-object plant tracking with one-shot target selection for weeding robots",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["example_tracking"],
    install_requires=[
        "numpy>=1.19.0",
        "pyyaml>=5.1",
        "matplotlib>=3.3.0",
        "scipy>=1.5.0",
    ],
    extras_require={
        "dev": [
            "pytest>=6.0.0",
            "pytest-cov>=2.12.0",
            "black>=21.5b2",
            "isort>=5.9.1",
            "flake8>=3.9.2",
        ],
    },
    python_requires=">=3.8",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Topic :: Scientific/Engineering :: Artificial Intelligence",
    ],
    entry_points={
        "console_scripts": [
            "weedtrack=example_tracking:main",
        ],
    },
)
