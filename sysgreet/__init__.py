"""sysgreet — login/session banner with a self-bootstrapping config file."""

__version__ = "0.1.0"
