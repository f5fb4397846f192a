from setuptools import setup, find_packages

packages = [x for x in find_packages('.') if x.startswith('nodelog')]

setup(
    name = "nodelog",
    version = "0.1",
    description = ("Merge and browse newline-delimited JSON logs from multiple nodes"),
    license = "BSD",
    packages=packages,
    python_requires=">=3.8",
    extras_require={
        "qt": ["PySide6<6.7"],
        "test": ["pytest", "PySide6<6.7"],
    },
    entry_points={
        "gui_scripts": ["nodelog = nodelog.logviewer.__main__:main"],
    },
    classifiers=[],
)
