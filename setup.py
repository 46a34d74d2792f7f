from setuptools import setup, find_packages

setup(
    name='sdtrace',
    version='0.1.0',
    author='sdtrace contributors',
    description='A Python library for sphere tracing signed distance fields with matcap shading and an arcball viewer.',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
    packages=find_packages(exclude=['tests', 'tests.*', 'examples']),
    include_package_data=True,
    install_requires=[
        'numpy',
        'scikit-image>=0.19',
        'watchdog',
        'moderngl',
        'glfw',
    ],
    extras_require={
        'test': [
            'pytest',
        ]
    },
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'Intended Audience :: Science/Research',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Topic :: Multimedia :: Graphics :: 3D Rendering',
        'Topic :: Scientific/Engineering :: Visualization',
    ],
    python_requires='>=3.8',
)
