import codecs
import os.path
import re

from setuptools import setup, find_packages

# We want the value of ``sblstem.__version__``. However, we cannot
# simply ``import sblstem`` since its stemmers require pyparsing which
# might not be installed. Hence we extract the version information
# "manually".
module_dir = os.path.dirname(__file__)
init_filename = os.path.join(module_dir, 'sblstem', '__init__.py')
with codecs.open(init_filename, 'r', 'utf8') as f:
    for line in f:
        m = re.match(r'\s*__version__\s*=\s*[\'"](.*)[\'"]\s*', line)
        if m:
            version = m.group(1)
            break
    else:
        raise Exception('Could not find version number.')

setup(
    name='sblstem',
    version=version,
    description='Snowball stemmers on a shared table-driven stemming machine',
    author='Florian Brucker',
    author_email='mail@florianbrucker.de',
    license='MIT',
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'Topic :: Text Processing :: Linguistic',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Operating System :: OS Independent',
    ],
    keywords='snowball stemmer stemming',
    packages=find_packages(exclude=['test']),
    install_requires=['pyparsing >= 3.0'],
    extras_require={'test': ['pytest']},
    python_requires='>=3.7',
    platforms=['any'],
    entry_points={'console_scripts': ['sblstem=sblstem.__main__:main']},
)
