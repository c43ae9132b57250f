[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mailroom"
version = "0.1.0"
description = "Mailbox storage helpers: thread records, trash handling, new-mail notifications and attribute-value codecs"
requires-python = ">=3.10"
dependencies = []
keywords = ["email", "mailbox", "threads", "dynamodb", "webhook", "sqs"]
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
    "Topic :: Communications :: Email",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["mailroom"]

[tool.pytest.ini_options]
addopts = "-ra"
