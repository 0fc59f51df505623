from setuptools import setup

setup(
    name="textmask",
    version="0.1.0",
    description="Masked text input engine with a PyQt5 line edit",
    packages=["textmask"],
    python_requires=">=3.10",
    install_requires=[
        "PyQt5",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "textmask=textmask.main:main",
        ],
    },
)
