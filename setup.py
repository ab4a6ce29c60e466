from setuptools import find_packages, setup

setup(
    name="ghgen",
    version="0.1.0",
    description="Generación de código a partir de prompts con extracción de archivos",
    author="GAHEOS",
    python_requires=">=3.9",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        "openai>=1.0",
        "tiktoken>=0.5",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7",
            "httpx>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "ghgen=ghgen.cli:main",
        ],
    },
)
