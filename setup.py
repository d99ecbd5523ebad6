from setuptools import setup, find_packages

setup(
    name="pizzastore",
    version="0.1.0",
    packages=find_packages(
        include=[
            "pizzastore", "pizzastore.*",
            "accounts", "accounts.*",
            "catalog", "catalog.*",
            "orders", "orders.*",
            "console", "console.*",
        ]
    ),
    include_package_data=True,
    install_requires=[
        "Django>=5.1",
        "djangorestframework>=3.15",
        "python-dotenv>=1.0",
    ],
    extras_require={
        "postgres": ["psycopg[binary]>=3.1"],
        "test": ["pytest>=7.0", "pytest-django>=4.5"],
    },
    author="Wayne",
    author_email="support@techwithwayne.com",
    description="Order management for a multi-store pizza chain: console session, JSON API and Django admin.",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    url="https://techwithwayne.com",
    license="MIT",
    classifiers=[
        "Framework :: Django",
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
        "License :: OSI Approved :: MIT License"
    ],
    python_requires='>=3.10',
)
