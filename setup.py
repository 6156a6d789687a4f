from setuptools import setup, find_packages

setup(
    name="depgraph",
    version="0.1.0",
    description="Gerenciador de dependências entre componentes (DEPEND/INSTALL/REMOVE/LIST).",
    license="GPL-3.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    install_requires=[
        "rich>=13.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "depgraph=depgraph.modules.cli:main",
        ],
    },
)
