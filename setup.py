"""
Packaging script for PyPI.
"""
import setuptools

setuptools.setup(
	name='tinyts',
	version='0.1.0',
	packages=['tinyts'],
	entry_points={
		'console_scripts': ["tinyts = tinyts.cmdline:main"],
	},
	license='MIT',
	description='A structural type-checker for a tiny typed language with objects and tagged unions',
	long_description=open('README.md').read(),
	long_description_content_type="text/markdown",
	classifiers=[
		"Programming Language :: Python :: 3.9",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Development Status :: 3 - Alpha",
		"Intended Audience :: Developers",
		"Intended Audience :: Education",
		"Topic :: Software Development :: Compilers",
		"Topic :: Education",
		"Environment :: Console",
	],
	python_requires='>=3.9',
	install_requires=[
		"booze-tools>=0.6.2.1",
	]
)
