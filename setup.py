# SPDX-License-Identifier: BSD-3-Clause
# Part of the JaxVdW project

from setuptools import setup, find_packages

_test_deps = [
    "pytest",
]

setup(
    name="JaxVdW",
    version="0.1",
    license="BSD-3",
    description="Buffered 14-7 van der Waals energy and forces with reduced sites in JAX",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    packages=find_packages(include=["jaxvdw", "jaxvdw.*"]),
    python_requires=">=3.10",
    install_requires=[
        "jax",
        "numpy",
        "typing_extensions; python_version < '3.11'",
    ],
    extras_require={
        # pip install JaxVdW[test]
        "test": _test_deps,
        # Optional JAX backends
        "cuda": ["jax[cuda]"],
        "cuda12": ["jax[cuda12]"],
        "tpu": ["jax[tpu]"],
    },
)
