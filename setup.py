from setuptools import setup, find_packages

NAME = "dense_net"
VERSION = "0.1.0"
DESCRIPTION = ("A minimal feed-forward neural network trainer with SGD, "
               "RMSProp and Adam optimizers.")
AUTHOR = "matee8"
AUTHOR_EMAIL = "graves-bluff-pesky@duck.com"

REQUIRED = ["numpy>=2.2"]

EXTRAS = {"test": ["pytest"]}

try:
    with open("README.md", "r", encoding="utf-8") as f:
        LONG_DESCRIPTION = f.read()
except FileNotFoundError:
    LONG_DESCRIPTION = DESCRIPTION

setup(name=NAME,
      version=VERSION,
      description=DESCRIPTION,
      long_description=LONG_DESCRIPTION,
      long_description_content_type="text/markdown",
      author=AUTHOR,
      author_email=AUTHOR_EMAIL,
      package_dir={"": "src"},
      packages=find_packages(where="src"),
      install_requires=REQUIRED,
      extras_require=EXTRAS)
