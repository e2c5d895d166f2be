from setuptools import setup, find_packages

setup(
    name='posekit',
    version='1.0.0',
    description='Orientation and pose math for left handed 3D frames: euler angles, quaternions, rotation matrices, '
                'and 4x3 affine transforms',
    packages=find_packages(include=['posekit', 'posekit.*']),
    python_requires='>=3.11',
    install_requires=['numpy', 'pandas'],
    extras_require={'test': ['scipy', 'pytest']},
)
