from setuptools import find_packages, setup

setup(
    name="vault_provider",
    version="0.1.0",
    packages=find_packages(exclude=["vault_provider_tests", "vault_provider_tests.*"]),
    python_requires=">=3.9",
    install_requires=[
        "dagster",
        "hvac>=1.1",
        "pydantic>=2",
        "python-dotenv",
        "requests",
        "tenacity>=8.2",
    ],
    extras_require={"dev": ["pytest"]},
    entry_points={
        "console_scripts": ["vault-provider=vault_provider.cli:main"],
    },
)
