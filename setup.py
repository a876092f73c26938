from setuptools import setup, find_packages

setup(
    name='fluxel-elementizer',
    version='0.1.0',
    py_modules=['fluxel', 'compiler'],
    packages=find_packages(exclude=['tests', 'tests.*']),
    install_requires=[
        'pydantic>=2',
        'tree-sitter>=0.22',
        'tree-sitter-typescript>=0.21',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'fluxel = fluxel:main',
        ],
    },
)
