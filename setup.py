from setuptools import setup, find_packages

setup(
    name="medikey",
    version="1.0.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "fastapi",
        "uvicorn[standard]",
        "sqlalchemy>=2.0",
        "alembic",
        "psycopg2-binary",
        "python-jose[cryptography]",
        "passlib[bcrypt]",
        "bcrypt>=4.0,<5.0",
        "python-multipart",
        "openai>=1.0",
        "python-dotenv",
        "pydantic>=2.0",
        "pydantic-settings",
        "email-validator",
        "websockets",
    ],
    extras_require={
        "test": [
            "pytest",
            "httpx",
        ],
    },
)
