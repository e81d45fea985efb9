from setuptools import find_packages, setup

setup(
    name='mobsmells',
    version='0.1.0',
    packages=find_packages(include=['mobsmells', 'mobsmells.*']),
    package_data={'mobsmells.parsers': ['resources/catalog.schema.json'],
        'mobsmells.output': ['resources/catalog.md.j2'],
        'mobsmells': ['configs/default.ini', 'resources/catalog.md']},
    python_requires='>=3.10',
    description='A catalog of energy and privacy code smells for mobile applications',
    install_requires=[
        "ruamel.yaml",
        "ply",
        "click",
        "prettytable",
        "pandas",
        "pytest",
        "jinja2",
        "jsonschema"
    ],
    entry_points={
        "console_scripts": [
            "mobsmells = mobsmells.__main__:main",
        ]
    }
)
