from pathlib import Path
from setuptools import setup, find_packages


BASE_DIR = Path(__file__).parent

with open(BASE_DIR / 'README.md') as f:
    long_description = f.read()


setup(
    name="dcmcharset",
    version="0.1.0",
    author="dcmcharset contributors",
    description=(
        "Decode DICOM character strings using Specific Character Set and "
        "ISO 2022 code extensions"
    ),
    long_description=long_description,
    long_description_content_type='text/markdown',
    license="MIT",
    keywords="dicom python medical imaging charset iso2022",
    classifiers=[
        "License :: OSI Approved :: MIT License",
        "Intended Audience :: Developers",
        "Intended Audience :: Healthcare Industry",
        "Development Status :: 3 - Alpha",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Operating System :: OS Independent",
        "Topic :: Scientific/Engineering :: Medical Science Apps.",
        "Topic :: Software Development :: Libraries"
    ],
    packages=find_packages(include=["dcmcharset", "dcmcharset.*"]),
    package_data={
        'dcmcharset': ['py.typed'],
    },
    include_package_data=True,
    zip_safe=False,
    python_requires='>=3.10',
    install_requires=[],
    extras_require={
        "tests": [
            "pytest",
        ],
    },
)
