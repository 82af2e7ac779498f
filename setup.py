from setuptools import setup, find_packages
from os import path
from io import open

setup_dir = path.abspath(path.dirname(__file__))
with open(path.join(setup_dir, 'README.md'),
          encoding='utf-8') as readme_file:
    long_description = readme_file.read()

setup(
    name="hyperbolic_illusion",
    version="0.1",
    packages=find_packages(include=["hyperbolic_illusion",
                                    "hyperbolic_illusion.*"]),
    include_package_data=True,

    install_requires=[
        "numpy>=1.22",
        "matplotlib>=3.5"
    ],

    extras_require={
        "test": ["pytest"]
    },

    license="MIT",
    description="""Draw visual illusions on regular tilings of the
    hyperbolic plane""",

    long_description=long_description,
    long_description_content_type="text/markdown"
)
