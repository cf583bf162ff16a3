from __future__ import annotations

from setuptools import find_packages, setup

setup(
    name="series-watchlist",
    version="0.1.0",
    # Repo convention: backend code lives under `backend/`, imported as
    # top-level `domain` / `application` / `infrastructure` / `config`.
    package_dir={"": "backend"},
    packages=find_packages(
        where="backend",
        include=[
            "domain",
            "domain.*",
            "application",
            "application.*",
            "infrastructure",
            "infrastructure.*",
            "config",
            "config.*",
        ],
    ),
    python_requires=">=3.10",
    install_requires=[
        "pydantic>=2.6",
        "python-dotenv>=1.0",
    ],
    extras_require={
        # Optional: Postgres-backed stores (in-memory stores are used without it).
        "postgres": ["asyncpg>=0.29"],
        "test": ["pytest>=7.4"],
    },
)
