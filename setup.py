from setuptools import find_packages
from setuptools import setup


version = '0.1.0'


def read_requirements(filename):
    requirements = []
    with open(filename) as f:
        for line in f:
            req = line.split('#')[0].strip()
            if req:
                requirements.append(req)
    return requirements


setup_requires = []

install_requires = read_requirements('requirements.txt')
test_install_requires = read_requirements('requirements_test.txt')


console_scripts = [
    "chomp-init-trajectory=skchomp.apps.init_trajectory:main",
]


setup(
    name='scikit-chomp',
    version=version,
    description='Trajectory initialization and failure recovery '
                'for CHOMP style motion planning',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
    license='MIT',
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Developers',
        'Natural Language :: English',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3.8',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Programming Language :: Python :: 3.13',
        'Programming Language :: Python :: Implementation :: CPython',
    ],
    python_requires='>=3.8',
    packages=find_packages(exclude=('tests', 'tests.*')),
    zip_safe=False,
    setup_requires=setup_requires,
    install_requires=install_requires,
    entry_points={
        "console_scripts": console_scripts,
    },
    extras_require={
        'test': test_install_requires,
        'all': test_install_requires,
    },
)
