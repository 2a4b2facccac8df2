# setup.py
from setuptools import setup, find_packages

setup(
    name="mclisp",
    version="0.1.0",
    description="A minimal LISP interpreter after McCarthy's micro-manual",
    packages=find_packages(include=["mclisp", "mclisp.*"]),
    python_requires=">=3.11",
    install_requires=[],
    extras_require={
        "test": ["pytest>=7", "hypothesis>=6.84"],
    },
    entry_points={
        "console_scripts": ["mclisp-repl = mclisp.repl_server:main"],
    },
    zip_safe=False,
)
