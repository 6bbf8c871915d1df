from setuptools import setup, find_packages
import re

# Read version from fbtoken/__init__.py
with open('fbtoken/__init__.py') as f:
    version = re.search(r'^__version__ = ["\']([^"\']+)["\']', f.read(), re.MULTILINE).group(1)

setup(
    name='firebase-token-helper',
    version=version,
    packages=find_packages(exclude=['tests', 'tests.*']),
    python_requires='>=3.8',
    install_requires=[
        'firebase-admin>=6.0.0',
        'google-auth',
        'requests>=2.25.0',
        'python-dotenv',
        'click>=8.0',
        'PyYAML',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'fbtoken=fbtoken.cli.__main__:main',
        ],
    },
    author='CLI Developer',
    description='Mint Firebase custom tokens and exchange them for ID tokens from the command line.',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
)
