from setuptools import setup, find_packages

setup(
    name='kubeadd',
    version='0.1.0',
    packages=find_packages(exclude=['kubeadd.tests']),
    include_package_data=True,
    install_requires=[
        'typer>=0.9,<0.20',
        'click>=8.0,<8.3',
        'kubernetes',
        'python-dotenv',
    ],
    extras_require={
        'test': [
            'pytest',
            'jsonschema',
            'PyYAML',
        ]
    },
    entry_points={
        'console_scripts': [
            'kubeadd=kubeadd.cli:main'
        ]
    },
    author='Your Name',
    description='Add and remove clusters in your kubeconfig with automatic backups',
    classifiers=[
        'Programming Language :: Python :: 3',
        'Operating System :: OS Independent',
    ],
    python_requires='>=3.8',
)
