import setuptools

with open("readme.md", "r") as fh:
    long_description = fh.read()

with open('requirements.txt') as f:
    requirements = f.read().splitlines()

setuptools.setup(
    name="vtube",
    version="1.0.0",
    description="Video sharing backend: videos, playlists, tweets, likes and subscriptions over a JSON API",
    license="MIT License",
    install_requires=requirements,
    extras_require={
        "test": ["pytest"],
    },
    packages=setuptools.find_packages(include=["vtube", "vtube.*"]),
    include_package_data=True,
    zip_safe=False,
    long_description=long_description,
    long_description_content_type="text/markdown",
    python_requires='>=3.11',
)
