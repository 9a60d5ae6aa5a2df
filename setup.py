from setuptools import find_packages, setup

setup(name='plugger',
      description='Codeplug decoder for MD-380 family DMR radios',
      packages=find_packages(include=["plugger*"]),
      include_package_data=True,
      version='0.1.0',
      python_requires=">=3.10,<4",
      install_requires=[
          'lark',
      ],
      extras_require={
          'test': ['pytest'],
      },
      entry_points={
          'console_scripts': [
              "plugger-dump=plugger.cli.dump:main",
          ],
      },
      )
