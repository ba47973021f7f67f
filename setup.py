from setuptools import setup, find_packages

setup(
    name="simprep",
    version="0.1.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.8",
    install_requires=[
        "click",
        "numpy",
        "pandas",
        "pyyaml",
        "tqdm",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "simprep=simprep.cli.main:main",
        ],
    },
)
