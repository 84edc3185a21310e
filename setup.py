from setuptools import setup, find_packages

setup(
  name = 'hwswaption',
  packages = find_packages(include=['hwswaption', 'hwswaption.*']),
  version = '0.1',
  license='Mozilla Public License Version 2.0',
  description = 'European swaption valuation under the Hull-White 1 factor model over scenario batches',
  author = 'shasa',
  keywords = ['finance', 'derivative', 'risk', 'swaption', 'hull-white'],
  python_requires='>=3.10',
  install_requires=[
    'numpy',
    'pandas',
    'scipy',
    'numba',
    'prettytable',
      ],
  extras_require={
    'test': ['pytest'],
  },
  classifiers=[
    'Development Status :: 3 - Alpha',
    'Intended Audience :: Developers',
    'License :: OSI Approved :: Mozilla Public License 2.0 (MPL 2.0)',
    'Programming Language :: Python :: 3.10',
  ],
)
