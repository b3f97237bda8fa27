from setuptools import setup, find_packages

setup(
    name='harbormaster',
    version='0.1.0',
    packages=find_packages(exclude=['harbormaster.tests']),
    include_package_data=True,
    install_requires=[
        'typer[all]',
        'fastapi',
        'uvicorn',
        'pydantic',
        'jsonschema',
        'pyyaml',
        'python-dotenv',
        'requests'
    ],
    extras_require={
        'test': [
            'pytest',
            'httpx',
        ]
    },
    entry_points={
        'console_scripts': [
            'harbormaster=harbormaster.cli:app'
        ]
    },
    author='Your Name',
    description='Idempotent droplet, DNS record and floating IP reconciliation for Digital Ocean and Cloudflare',
    classifiers=[
        'Programming Language :: Python :: 3',
        'Operating System :: OS Independent',
    ],
    python_requires='>=3.8',
)
