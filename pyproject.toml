[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "smarthome"
version = "0.1.0"
description = "Smart house model with a smart socket controlled over TCP and a thermometer fed over UDP"
requires-python = ">=3.10"
dependencies = []
keywords = ["smart home", "home automation", "smart socket", "thermometer", "tcp", "udp", "asyncio"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Framework :: AsyncIO",
    "Topic :: Home Automation",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = [
    "pytest>=7",
    "pytest-asyncio>=0.21",
]

[project.scripts]
smarthome-report = "smarthome.report_demo:main"
smarthome-socket-server = "smarthome.tcp.socket_server:main"
smarthome-socket-cli = "smarthome.tcp.socket_client:main"
smarthome-thermometer = "smarthome.udp.thermometer:main"
smarthome-thermometer-client = "smarthome.udp.thermometer:client_main"
smarthome-async-thermometer = "smarthome.udp.async_thermometer:main"
smarthome-async-thermometer-client = "smarthome.udp.async_thermometer:client_main"

[tool.setuptools.packages.find]
include = ["smarthome*"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]
