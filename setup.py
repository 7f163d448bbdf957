from setuptools import find_packages, setup

setup(
    name="vestaboard-vbml",
    version="0.1.0",
    description="Render VBML documents onto Vestaboard split-flap boards",
    packages=find_packages(include=["vestaboard", "vestaboard.*"]),
    python_requires=">=3.11",
    install_requires=[
        "numpy>=1.23",
        "pydantic>=2.0",
        "fastapi>=0.100",
        "uvicorn>=0.22",
        "httpx>=0.24",
    ],
    extras_require={
        "test": ["pytest", "pytest-asyncio"],
    },
    entry_points={
        "console_scripts": ["vestaboard=vestaboard.main:main"],
    },
)
