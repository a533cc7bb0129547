from setuptools import setup, find_packages

INSTALL_REQUIRES = [
    "pydantic>=2.0,<3.0.0",
    "sqlalchemy[asyncio]>=2.0",
    "typing-extensions>=4.6.0",
]

EXTRAS_REQUIRE = {
    "test": [
        "pytest>=7.0",
        "pytest-asyncio>=0.21",
    ]
}

setup(
    name="keyset-paginator",
    version="0.1.0",
    description="Keyset (cursor) pagination for ordered SQLAlchemy queries: previous/next pages without OFFSET.",
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires='>=3.10',
    install_requires=INSTALL_REQUIRES,
    extras_require=EXTRAS_REQUIRE,
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
    ],
)
