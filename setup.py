from setuptools import find_packages, setup

setup(
    name="turkish-text-repair",
    version="0.1.0",
    author="Raporlama Ekibi",
    description="Sales report Turkish character (CP1254 mojibake) repair service",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["app", "main"],
    install_requires=[
        "pandas",
        "pyyaml",
        "fastapi",
        "uvicorn",
        "pydantic",
    ],
    extras_require={
        "test": [
            "pytest",
            "httpx",
        ],
    },
)
