from setuptools import setup, find_packages

def parse_requirements(requirements):
    with open(requirements) as f:
        return [l.strip('\n') for l in f if l.strip('\n') and not l.startswith('#')]

requirements = parse_requirements("requirements.txt")

setup(
    name='spiget_backend',
    version='0.1.0',
    install_requires=requirements,
    extras_require={
        "test": ["pytest", "pytest-asyncio"],
    },
    package_dir={"": "src"},
    packages=find_packages("src"),
    package_data={
        "spiget_backend.exceptions": ["error_registry.yaml"],
    },
    py_modules=["server"],
)
