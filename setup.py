import setuptools
import os

own_dir = os.path.abspath(os.path.dirname(__file__))


def requirements():
    with open(os.path.join(own_dir, 'requirements.txt')) as f:
        for line in f.readlines():
            line = line.strip()
            if not line or line.startswith('#'):
                continue
            yield line


def modules():
    return [
        'gitutil',
        'manifest',
        'version',
    ]


def packages():
    return setuptools.find_packages(include=('ci', 'changelog', 'postprocess'))


def version():
    with open(os.path.join(own_dir, 'VERSION')) as f:
        return f.read().strip()


setuptools.setup(
    name='plugin-release-postprocess',
    version=version(),
    description='Release post-processing for plugins (changelog generation, version bump)',
    python_requires='>=3.11',
    py_modules=modules(),
    packages=packages(),
    install_requires=list(requirements()),
    extras_require={
        'test': [
            'pytest',
        ],
    },
    entry_points={
        'console_scripts': [
            'plugin-release-postprocess = postprocess.cli:main',
        ],
    },
)
