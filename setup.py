from setuptools import setup, find_packages

setup(
    name = 'moodcount',
    version = '0.1.0',
    license = 'Apache Software License (ASF)',
    packages = find_packages(exclude=['tests', 'examples']),
    entry_points = {
        'console_scripts': [
            'moodcount = moodcount.cmd:execute_and_exit',
        ]
    },
    zip_safe = True,
    python_requires = '>=3.8',
    install_requires = ['ujson'],
    extras_require = {
        'test': ['pytest'],
    },
)
