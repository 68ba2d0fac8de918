# encoding: utf-8


class KioskException(Exception):
    pass


class KioskConfigurationException(KioskException):
    pass
