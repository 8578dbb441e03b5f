"""Setup file for alertmanager-webex-relay package."""
from __future__ import annotations

from setuptools import find_packages, setup

setup(
    name="alertmanager-webex-relay",
    version="1.0.0",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    package_data={"webex_relay": ["resources/*"]},
    include_package_data=True,
    python_requires=">=3.11",
    install_requires=[
        "fastapi>=0.111.0",
        "uvicorn[standard]>=0.30.0",
        "pydantic>=2.7.0",
        "pydantic-settings>=2.3.0",
        "httpx>=0.27.0",
        "structlog>=24.1.0",
        "jinja2>=3.1.4",
        "jsonschema>=4.22.0",
        "PyYAML>=6.0.1",
    ],
    extras_require={
        "test": [
            "pytest>=8.0.0",
            "pytest-asyncio>=0.23.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "webex-relay=webex_relay.main:run",
        ],
    },
)
