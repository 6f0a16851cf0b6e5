import os
import sys

from setuptools import setup, find_packages

if sys.version_info < (3, 10):
    sys.exit("Python 3.10 is the minimum required version")

PROJECT_ROOT = os.path.dirname(__file__)

about = {}
with open(os.path.join(PROJECT_ROOT, "src", "rawhttp", "__about__.py")) as file_:
    exec(file_.read(), about)

with open(os.path.join(PROJECT_ROOT, "README.rst")) as file_:
    long_description = file_.read()

INSTALL_REQUIRES = [
    "tomli; python_version < '3.11'",
]

TESTS_REQUIRE = [
    "h11",
    "hypothesis",
    "pytest",
    "pytest-cov",
]

setup(
    name="rawhttp",
    version=about["__version__"],
    python_requires=">=3.10",
    description="Byte exact HTTP/1.x message construction and serialisation.",
    long_description=long_description,
    author="rawhttp contributors",
    license="MIT",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Internet :: WWW/HTTP",
        "Topic :: Software Development :: Libraries :: Python Modules",
        "Topic :: Software Development :: Testing",
    ],
    packages=find_packages("src"),
    package_dir={"": "src"},
    install_requires=INSTALL_REQUIRES,
    extras_require={
        "tests": TESTS_REQUIRE,
    },
    include_package_data=True,
)
