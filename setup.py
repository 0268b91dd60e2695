from setuptools import setup, find_packages

major = 0

__version__ = '0.1.0'

requirements = [
    'coloredlogs',
    'pymongo',
]

setup(
    name='nonfungible',
    version=__version__,
    description='Non-fungible token ledger state: ownership, approvals, supply and enumeration over a key-value store.',
    packages=find_packages(exclude=['tests', 'tests.*']),
    install_requires=requirements,
    extras_require={
        'test': ['pytest'],
    },
    classifiers=[
        'Programming Language :: Python :: 3',
    ],
    zip_safe=True,
    include_package_data=True,
)
