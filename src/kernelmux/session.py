""" Session metadata stamped onto every outbound kernel message.
"""

import os
import uuid


# Environment variables consulted, in order, for the username. The fallback
# is the same literal the classic notebook uses.

username_variables = ('LOGNAME', 'USER', 'LNAME', 'USERNAME')
default_username = 'username'


def get_username(environ=None):
    """ Return the username from the supplied *environ* mapping, which
        defaults to :data:`os.environ`. The first non-empty variable in
        :data:`username_variables` wins.
    """

    if environ is None:
        environ = os.environ

    for variable in username_variables:
        value = environ.get(variable)
        if value:
            return value

    return default_username



def header(session=None, username=None, environ=None):
    """ Return a new session header: a dictionary with a *session* id and a
        *username*. A random session id is generated if one is not
        provided; the username is resolved via :func:`get_username`.
    """

    if session is None:
        session = str(uuid.uuid4())

    if username is None:
        username = get_username(environ)

    return {'session': session, 'username': username}


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
