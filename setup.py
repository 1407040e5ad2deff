from setuptools import find_packages, setup


version = '0.1.0'


setup(
    name='resourcer',
    version=version,
    description='Resource routing for asynchronous WebOb applications',
    long_description=open('README').read() + '\n\n' + open('CHANGES').read(),
    license='BSD',
    packages=find_packages(exclude=['ez_setup', 'examples', 'tests']),
    python_requires='>=3.8',
    install_requires=[
        'WebOb >= 1.8',
        'inflection >= 0.5',
    ],
    include_package_data=True,
    test_suite='resourcer.tests',
    zip_safe=False,
    classifiers=[
        'Development Status :: 4 - Beta',
        'Environment :: Web Environment',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: BSD License',
        'Operating System :: OS Independent',
        'Topic :: Software Development :: Libraries',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3 :: Only',
        'Topic :: Internet :: WWW/HTTP :: WSGI'
    ],
    keywords='resourcer resources rest routes routing webob')
