# -*- coding: utf-8 -*-

# SPDX-License-Identifier: Apache-2.0

from setuptools import setup, find_packages
import os
this = os.path.dirname(os.path.abspath(__file__))

with open(os.path.join(this, "requirements.txt"), "r") as f:
    requirements = [_ for _ in [_.strip("\r\n ")
                                for _ in f.readlines()] if _]

packages = find_packages(exclude=["tests", "tests.*"])
assert packages

# read version from the package file.
version_str = '1.0.0'
with (open(os.path.join(this, 'winmlconvert/__init__.py'), "r")) as f:
    line = [_ for _ in [_.strip("\r\n ")
                                for _ in f.readlines()] if _.startswith("__version__")]
    if len(line) > 0:
        version_str = line[0].split('=')[1].strip('" ')

README = os.path.join(this, "README.md")
with open(README) as f:
    long_description = f.read()

setup(
    name='winmlconvert',
    version=version_str,
    description="Converts scikit-learn and CoreML models to ONNX and "
                "images to the tensors those models consume",
    long_description=long_description,
    long_description_content_type='text/markdown',
    license='Apache License v2.0',
    author='winmlconvert contributors',
    packages=packages,
    include_package_data=True,
    install_requires=requirements,
    extras_require={
        'sklearn': ['scikit-learn>=1.0'],
        'coreml': ['coremltools'],
        'image': ['Pillow'],
        'test': ['pytest', 'onnxruntime', 'scikit-learn>=1.0', 'Pillow'],
    },
    python_requires='>=3.8',
    classifiers=[
        'Development Status :: 4 - Beta',
        'Environment :: Console',
        'Intended Audience :: Developers',
        'Operating System :: MacOS :: MacOS X',
        'Operating System :: Microsoft :: Windows',
        'Operating System :: POSIX :: Linux',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'License :: OSI Approved :: Apache Software License'],
)
