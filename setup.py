# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="driveaudit",
    version="1.0.0",
    description="Audit folder sizes and file counts of a Google shared drive as an annotated tree",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["driveaudit", "driveaudit.*"]),
    python_requires=">=3.9",
    install_requires=[
        "google-api-python-client",  # Drive v3 listing client
        "google-auth",               # Credentials and refresh errors
        "google-auth-oauthlib",      # Local-server consent flow
        "oauthlib",                  # OAuth2 error types raised by the consent flow
        "httplib2",                  # Transport errors raised by the Drive client
        "requests",                  # Token refresh transport
        "pyuca",                     # Unicode collation for sibling ordering
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'driveaudit=driveaudit.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
