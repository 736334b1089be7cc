"""
Packaging script for PyPI.
"""
import setuptools
from pathlib import Path

try:
	from boozetools.macroparse.runtime import make_tables
except ImportError:
	pass
else:
	make_tables(Path(__file__).parent / "cpsfront" / "Dartlet.md")

setuptools.setup(
	name='cpsfront',
	version='0.1.0',
	packages=['cpsfront', ],
	package_data={
		'cpsfront': ["Dartlet.md", "Dartlet.automaton"],
	},
	entry_points={
		'console_scripts': ["cpsfront = cpsfront.cmdline:main"],
	},
	license='MIT',
	description='Canonicalizes sync, async, and generator functions for conversion to continuation-passing style',
	long_description=open('README.md').read(),
	long_description_content_type="text/markdown",
	classifiers=[
		"Programming Language :: Python :: 3.9",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Development Status :: 3 - Alpha",
		"Intended Audience :: Developers",
		"Topic :: Software Development :: Compilers",
		"Environment :: Console",
	],
	python_requires='>=3.9',
	install_requires=[
		"booze-tools>=0.6.2.1",
		"sexpdata>=1.0.0",
	],
	extras_require={
		'test': ["pytest"],
	},
)
