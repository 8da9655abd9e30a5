from setuptools import setup, find_packages

setup(
    name="aigit",
    version="0.1.0",
    packages=find_packages(include=["aigit", "aigit.*"]),
    install_requires=[
        "httpx",
        "rich",
    ],
    extras_require={
        "test": [
            "pytest",
            "GitPython",
        ],
    },
    entry_points={
        'console_scripts': [
            'aigit=aigit.cli:main_cli',
        ],
    },
    author="Lincoln Aleixo",
    author_email="",
    description="AI-powered git commit message generator using Groq",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    url="https://github.com/lincolnaleixo/aigit",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development :: Version Control :: Git",
    ],
    python_requires=">=3.8",
)
