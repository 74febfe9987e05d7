from setuptools import setup, find_packages

setup(
    name="compls",
    version="0.1.0",
    description="Compact binary encoding of 2D line strings: delta + fixed-point quantization + varints",
    packages=find_packages(include=["compls", "compls.*"]),
    python_requires=">=3.10",
    install_requires=[
        "numpy",
        "zstandard",
        "cloudpickle",
        "hydra-core",
        "omegaconf",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "compls=compls.__main__:main",
        ],
    },
)
