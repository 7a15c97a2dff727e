from setuptools import find_packages, setup

setup(
    name="ado-lab-bootstrap",
    version="0.1.0",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        "pydantic>=2",
        "pyyaml",
        "requests",
        "rich",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        "console_scripts": [
            "ado-lab-bootstrap=ado_lab_bootstrap.cli:main",
        ],
    },
    description="Bootstrap Azure DevOps projects, repositories and pipelines for lab environments",
    author="Christos Galanopoulos",
    author_email="christosgalano@outlook.com",
    python_requires=">=3.11",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Build Tools",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
    ],
)
