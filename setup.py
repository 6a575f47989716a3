"""
chromfrag: fragment files for single-cell chromatin accessibility
"""
from setuptools import find_packages, setup

dependencies = ['biopython', 'click', 'pysam', 'ruamel.yaml']

setup(
    name='chromfrag',
    version='0.1.0',
    license='MIT',
    description='Generate deduplicated per-cell fragment files from an aligned .bam and its barcode reads.',
    long_description=__doc__,
    packages=find_packages(exclude=['tests']),
    include_package_data=True,
    zip_safe=False,
    platforms='any',
    install_requires=dependencies,
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'chromfrag = chromfrag.cli:main'
        ],
    },
    classifiers=[
        # As from http://pypi.python.org/pypi?%3Aaction=list_classifiers
        # 'Development Status :: 1 - Planning',
        # 'Development Status :: 2 - Pre-Alpha',
         'Development Status :: 3 - Alpha',
        # 'Development Status :: 4 - Beta',
        # 'Development Status :: 5 - Production/Stable',
        'Environment :: Console',
        'Intended Audience :: Science/Research',
        'License :: OSI Approved :: MIT License',
        'Operating System :: POSIX',
        'Operating System :: MacOS',
        'Operating System :: Unix',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Topic :: Scientific/Engineering :: Bio-Informatics',
    ]
)
