import setuptools


with open('README.md', 'r') as fh:
    long_description = fh.read()

setuptools.setup(
    name="agenda",
    version="0.3.0",
    description="Agenda is a lightweight single-user event registry.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=setuptools.find_packages(exclude=['tests']),
    classifiers=(
        "Programming Language :: Python :: 3",
        "Development Status :: 3 - Alpha",
        "Intended Audience :: End Users/Desktop",
        "License :: OSI Approved :: Apache Software License",
        "Topic :: Office/Business :: Scheduling",
        "Topic :: Utilities",
    ),
    install_requires=[
        "PyYAML>=5.1",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        "console_scripts": [
            "agenda=agenda.cli.__main__:main",
        ],
    },
)
