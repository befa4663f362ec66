from setuptools import setup, find_packages

setup(
    name="interviewpilot",
    version="0.1.0",
    description="Live interview assistant: speaker-labelled transcripts, block timer and follow-up suggestions",
    author="",
    python_requires=">=3.9",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "pyaudio>=0.2.11",
        "numpy>=1.21.0",
        "rich>=12.5.0",
        "pyyaml>=6.0.0",
        "pypubsub>=4.0.3",
        "aiohttp>=3.8.0",
    ],
    extras_require={
        "tests": [
            "pytest>=7.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "interviewpilot=interviewpilot.main:main",
        ],
    },
)
