from setuptools import setup, find_packages

setup(
    name='imbsweep',
    version='0.1.0',
    packages=find_packages('src'),
    package_dir={'': 'src'},
    python_requires='>=3.9',
    install_requires=[
        'pandas',
        'numpy',
        'xgboost',
        'matplotlib',
        'scikit-learn',
        'joblib',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': ['imbsweep=imbsweep.cli:main'],
    },
    description='Benchmarks binary classifiers on synthetic two-group data across a sliding class-imbalance sweep.',
    author='Jason Orender',
    author_email='jason@orender.net',
)
