def task_test():
    """Run the test suite"""
    return {
        'actions': ['pytest'],
        'verbosity': 2,
    }

def task_install():
    """Install the package in editable mode with test dependencies"""
    return {
        'actions': ['pip install -e ".[test]"'],
        'verbosity': 2,
    }
