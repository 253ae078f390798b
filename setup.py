from setuptools import setup, find_packages

setup(
    name='sprig-lang',
    version='0.1.0',
    py_modules=['compiler'],
    packages=find_packages(include=['sprig', 'sprig.*']),
    python_requires='>=3.9',
    install_requires=[
        'lark>=1.1',
        'pydantic>=2',
    ],
    extras_require={
        'test': ['pytest'],
    },
)
