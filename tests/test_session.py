import uuid

import kernelmux


def test_username_order():

    environ = dict(LOGNAME='logname', USER='user', LNAME='lname', USERNAME='username_var')
    assert kernelmux.session.get_username(environ) == 'logname'

    del environ['LOGNAME']
    assert kernelmux.session.get_username(environ) == 'user'

    del environ['USER']
    assert kernelmux.session.get_username(environ) == 'lname'

    del environ['LNAME']
    assert kernelmux.session.get_username(environ) == 'username_var'


def test_username_fallback():

    assert kernelmux.session.get_username(dict()) == 'username'
    assert kernelmux.session.get_username(dict(LOGNAME='')) == 'username'


def test_username_default_environment(monkeypatch):

    for variable in kernelmux.session.username_variables:
        monkeypatch.delenv(variable, raising=False)

    monkeypatch.setenv('USER', 'from-environment')
    assert kernelmux.session.get_username() == 'from-environment'


def test_header():

    header = kernelmux.session.header(environ=dict(USER='someone'))
    assert header['username'] == 'someone'
    uuid.UUID(header['session'])

    other = kernelmux.session.header(environ=dict(USER='someone'))
    assert other['session'] != header['session']


def test_header_supplied():

    header = kernelmux.session.header('abc', 'def')
    assert header == {'session': 'abc', 'username': 'def'}


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
