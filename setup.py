# setup.py
from setuptools import setup, find_packages

setup(
    name="kont",
    version="0.1.0",
    description="A CPS evaluator with mutable cells, multi-shot continuations and resumable exceptions",
    packages=find_packages(include=["kont", "kont.*"]),
    python_requires=">=3.10",
    install_requires=[],
    extras_require={
        "tests": ["pytest", "hypothesis"],
    },
    zip_safe=False,
)
