"""Setup script for the rigid geometry kernel."""

from setuptools import find_packages, setup

setup(
    name="rigid-geometry",
    version="0.1.0",
    description="Rigid transforms, point/line metrics and motion estimation in 2D and 3D",
    author="VIP Research Team",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.10",
    install_requires=[
        "numpy>=2.0.0",
        "opencv-python>=4.12.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "black>=23.0.0",
            "ruff>=0.1.0",
            "mypy>=1.0.0",
        ],
    },
)
