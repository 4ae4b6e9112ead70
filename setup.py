from setuptools import setup

with open("README.md") as f:
    long_description = f.read()

setup(
    name="twscroll",
    version="0.1.0",
    description="Scroll through the pages of the Twitter REST API",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=["twscroll.base", "twscroll.rest"],
    license="MIT",
    zip_safe=False,
    install_requires=["requests", "python-dateutil"],
    extras_require={"test": ["pytest"]},
    python_requires=">=3.8",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
    ],
    keywords="twitter REST API pagination cursor max_id client",
)
