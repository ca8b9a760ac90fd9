from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

with open("requirements.txt", "r", encoding="utf-8") as fh:
    requirements = [line.strip() for line in fh if line.strip() and not line.startswith("#")]

setup(
    name="ocr-bridge",
    version="1.0.0",
    author="Sehat Locker",
    description="Method-channel OCR bridge: extract text from image files through a typed request/response contract",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["ocr_bridge", "ocr_bridge.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: Scientific/Engineering :: Image Recognition",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.9",
    install_requires=requirements,
    extras_require={
        "paddle": [
            "paddleocr>=3.0.0",
            "paddlepaddle>=3.0.0",
        ],
        "dev": [
            "pytest>=7.4.0",
            "pytest-cov>=4.1.0",
            "httpx>=0.24.0",
            "black>=23.0.0",
            "flake8>=6.0.0",
            "mypy>=1.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "ocr-bridge-api=ocr_bridge.api.server:main",
        ],
    },
    include_package_data=True,
    package_data={
        "ocr_bridge": ["config.yaml"],
    },
)
