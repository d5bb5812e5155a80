# setup.py
from setuptools import setup, find_packages

setup(
    name="meshdepth",
    version="1.0.0",
    description="Wavefront OBJ loader producing interleaved GPU buffers with per-vertex internal depth",
    packages=find_packages(include=["meshdepth", "meshdepth.*"]),
    python_requires=">=3.9",
    install_requires=[
        "numpy>=1.20.0",
        "numba>=0.55.0",
        "glfw>=2.5.0",
        "PyOpenGL>=3.1.5",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "meshdepth=meshdepth.__main__:main",
        ],
    },
)
