from setuptools import setup, find_packages
from pathlib import Path

here = Path(__file__).parent
long_description = (here / "README.md").read_text(encoding="utf-8")

setup(
    name="intel-workbench",
    version="0.1.0",
    description="Analyst workbench for ACH scoring, IOC extraction and structured-analysis reports",
    long_description=long_description,
    long_description_content_type="text/markdown",

    packages=find_packages(exclude=["tests*", "examples*", "docs*"]),
    include_package_data=True,
    package_data={
        "intel_workbench": ["config/*.yaml", "templates/*.j2"],
    },
    python_requires=">=3.10",

    install_requires=[
        "pydantic>=2.6.0",
        "jsonschema>=4.0.0",
        "PyYAML>=6.0",
        "jinja2>=3.1.0",
        "pandas>=2.2.0",
        "matplotlib>=3.8.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },

    entry_points={
        "console_scripts": [
            "intel-workbench=intel_workbench.main:main"
        ]
    },

    classifiers=[
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Intended Audience :: Information Technology",
        "Topic :: Security",
    ],

    keywords="threat-intelligence ach ioc defang structured-analytic-techniques cti",
    license="MIT",
)
