from setuptools import setup, find_namespace_packages

setup(
    name="BubblePie",
    version="0.1.0",
    description="Bubble pie scatter charts: pie wedge geometry and pie-aware axis limits",
    packages=find_namespace_packages(include=["BubblePie", "BubblePie.*"]),
    install_requires=[
        # Pin 1.24.4 for Python < 3.12
        "numpy==1.24.4; python_version<'3.12'",
        # Allow newer NumPy for Python >= 3.12
        "numpy>=1.26.0; python_version>='3.12'",
        "pyqtgraph>=0.13.3",
        "PyQt5>=5.15.10",
        "PyQt5-sip>=12.15.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    python_requires=">=3.9",
)
