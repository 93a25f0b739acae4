class HomeDirectoryNotFound(Exception):
    """
    Raised when the HOME environment variable is not set,
    so no default instance folder or launch script can be derived
    """

    pass


class InvalidInstanceConfig(Exception):
    """
    Raised when trying to get information from
    an unreadable or incorrectly formatted instance.cfg
    """

    pass


class LaunchError(Exception):
    """
    Raised when the launch script could not be started
    """

    pass
