"""
Mulcos

Fused multiply-cosine-accumulate kernel providing:
- Bounds-checked vector-group access driven by a shape descriptor
- Launch geometry and global index computation
- Vectorized NumPy and per-worker reference backends
- Optional PyTorch integration
"""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="mulcos",
    version="0.1.0",
    author="Mulcos Team",
    description="Fused multiply-cosine-accumulate compute kernel",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["mulcos", "mulcos.*", "mulcos_torch", "mulcos_torch.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.20.0",
    ],
    extras_require={
        "torch": [
            "torch>=2.0.0",
        ],
        "dev": [
            "pytest>=7.0.0",
            "pytest-benchmark>=4.0.0",
            "black>=23.0.0",
            "mypy>=1.0.0",
            "ruff>=0.1.0",
        ],
    },
    package_data={
        "mulcos": ["py.typed"],
        "mulcos_torch": ["py.typed"],
    },
)
