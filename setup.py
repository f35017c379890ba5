#!/usr/bin/env python3

from setuptools import setup

setup(
    name="pngstash",
    version="1.0.0b1",
    description='A python package to hide messages in PNG chunks',
    long_description="""A pure python package to hide, extract and remove messages
    stored in ancillary chunks of PNG files, without touching the image data""",
    license='GPL-3.0',
    classifiers=[
        #   3 - Alpha
        #   4 - Beta
        #   5 - Production/Stable
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'Topic :: Software Development :: Libraries',
        'License :: OSI Approved :: GNU General Public License (GPL)',
        'Programming Language :: Python :: 3',
    ],
    keywords='png library steganography chunks',
    packages=["pngstash"],
    install_requires=['requests'],
    extras_require={
        'test': ['pytest', 'Pillow'],
    },
    entry_points={
        'console_scripts': ['pngstash=pngstash.cli:main'],
    },
    python_requires='>=3.8',
    package_data={},
    data_files=[],
)
