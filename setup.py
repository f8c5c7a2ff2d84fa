from setuptools import setup

setup(
    name="consoletools",
    version="1.0.0",
    description="Colored console output, a small format mini-language, "
    "and typed console input",
    license="MIT",
    packages=["consoletools"],
    python_requires=">=3.10",
    install_requires=[
        "typing_extensions>=4.6",
    ],
    extras_require={
        "test": [
            "pytest",
            "sybil>=6",
        ],
        "doc": [
            "sphinx",
            "furo",
        ],
    },
)
