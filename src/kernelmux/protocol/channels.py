"""Channel vocabulary.

Keep these in one place to avoid stringly-typed channel handling.
"""

SHELL = 'shell'
CONTROL = 'control'
STDIN = 'stdin'
IOPUB = 'iopub'

names = (SHELL, CONTROL, STDIN, IOPUB)

# Socket pattern used by a frontend for each channel. The kernel binds the
# matching ROUTER and PUB sockets.

DEALER = 'dealer'
SUB = 'sub'

patterns = {
    SHELL: DEALER,
    CONTROL: DEALER,
    STDIN: DEALER,
    IOPUB: SUB,
}

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
