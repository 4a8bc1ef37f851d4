from setuptools import setup, find_packages


setup(
    name="kubenode",
    version="0.1",
    description="Machine provisioning for local Kubernetes clusters",
    author="Kubenode Developers",
    license="Apache-2.0",
    packages=find_packages(),
    install_requires=[
        "Twisted",
        "PyYAML",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "kubenode = kubenode.control:run",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Intended Audience :: System Administrators",
        "Programming Language :: Python :: 3",
        "Topic :: System :: Clustering",
        ],
    )
