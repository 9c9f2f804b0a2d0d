# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="sitemaptree",
    version="1.0.0",
    description="Visor de sitemaps XML como árbol de URLs plegable",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["sitemaptree*"]),
    package_data={"sitemaptree.interface.locales": ["*.json"]},
    include_package_data=True,
    python_requires=">=3.9",
    install_requires=[
        "customtkinter",  # Interfaz gráfica (diagrama y visor de logs)
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'sitemaptree=sitemaptree.main:main',  # CLI con argumentos, GUI sin ellos
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
