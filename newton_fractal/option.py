# -*- coding: utf-8 -*-
"""
Provides the Option class for config file and command line parsing.
The parsed values are available as attributes and as a RenderConfig.
"""

__all__ = ['Option']

import os, sys

from configparser import ConfigParser
from optparse import OptionGroup, OptionParser
from os.path import basename, exists

from .base import DEFAULTS, RenderConfig

POSITIONAL = ('n', 'width', 'height', 'max_iters', 'tolerance', 'gamma')

class Option(object):

    def __init__(self, args=None, prog=None):

        args = list(sys.argv[1:] if args is None else args)
        self.prog = prog or basename(sys.argv[0])

        usage = "%prog [--config filepath [section]] [options] " \
                "[n [width [height [max_iters [tolerance [gamma]]]]]]"
        epilog = """
          Integer values exceeding the range specification are silently
          clipped to the respective minimum or maximum value. Positional
          arguments take precedence over the options of the same name.
          """
        epilog = " ".join([line.lstrip() for line in epilog.splitlines()])

        p = OptionParser(usage=usage, version="%prog 0.1.0", epilog=epilog, prog=self.prog)

        def _opt(parser, opt, t, h):
            parser.add_option(opt, type=t, help=h, metavar="ARG")

        # allow options with underscore by replacing with dash
        for i in range(len(args)):
            if args[i].startswith('--'):
                name, sep, value = args[i].partition('=')
                args[i] = name.replace('_', '-') + sep + value

        # configure options
        _opt(p, "--degree", "int", "degree n of the polynomial z^n - 1 [1-32]: 5")
        _opt(p, "--width", "int", "width of image [1-16000]: 1655")
        _opt(p, "--height", "int", "height of image [1-16000]: 1655")
        _opt(p, "--max-iters", "int", "maximum Newton iterations [1-100000]: 100")
        _opt(p, "--tolerance", "float", "convergence tolerance [> 0]: 1e-6")
        _opt(p, "--gamma", "float", "brightness falloff exponent [> 0]: 4.0")
        _opt(p, "--output", "string", "image filename: newton_fractal.png")

        g = OptionGroup(p, "CPU Options (newton_parfor, newton_queue)")
        _opt(g, "--num-threads", "string", "number of threads to use: auto")
        p.add_option_group(g)

        p.set_defaults(
            degree=DEFAULTS['n'], width=DEFAULTS['width'],
            height=DEFAULTS['height'], max_iters=DEFAULTS['max_iters'],
            tolerance=DEFAULTS['tolerance'], gamma=DEFAULTS['gamma'],
            output='newton_fractal.png', num_threads='auto' )

        # optionally, override defaults from a config file
        self.__handle_config(p, args)

        # process command-line arguments
        (opt, args) = p.parse_args(args)

        # show usage
        if len(args) > len(POSITIONAL):
            p.print_help()
            sys.exit(2)

        values = dict(
            n=opt.degree, width=opt.width, height=opt.height,
            max_iters=opt.max_iters, tolerance=opt.tolerance, gamma=opt.gamma)

        for key, arg in zip(POSITIONAL, args):
            conv = float if key in ('tolerance', 'gamma') else int
            try:
                values[key] = conv(arg)
            except ValueError:
                p.error(f"invalid {key} value: '{arg}'")

        if not values['tolerance'] > 0.0:
            p.error(f"tolerance must be positive: {values['tolerance']}")
        if not values['gamma'] > 0.0:
            p.error(f"gamma must be positive: {values['gamma']}")

        # clamp to minimum-maximum values
        self.n = max(1, min(32, values['n']))
        self.width = max(1, min(16000, values['width']))
        self.height = max(1, min(16000, values['height']))
        self.max_iters = max(1, min(100000, values['max_iters']))
        self.tolerance = values['tolerance']
        self.gamma = values['gamma']
        self.output = opt.output

        if opt.num_threads != 'auto':
            try:
                self.num_threads = max(1, int(opt.num_threads))
            except ValueError:
                p.error(f"invalid num-threads value: '{opt.num_threads}'")
        else:
            ncpu = int(
                os.getenv('NUMBA_NUM_THREADS') or
                os.getenv('NUM_THREADS') or
                (os.cpu_count() or 2) - 1
                )
            self.num_threads = max(1, ncpu)

        del opt, args


    def render_config(self):

        return RenderConfig(
            n=self.n, width=self.width, height=self.height,
            max_iters=self.max_iters, tolerance=self.tolerance,
            gamma=self.gamma )


    def __handle_config(self, parser, args):

        if len(args) >= 1 and args[0].startswith('--config'):
            (_, sep, config_path) = args[0].partition('=')
            if sep:
                del args[0]
            else:
                if len(args) < 2:
                    parser.error("--config option requires an argument")
                config_path = args[1]
                del args[1], args[0]

            if len(args) >= 1 and not args[0].startswith('-') and \
                    not _is_number(args[0]):
                section = args[0]
                del args[0]
            else:
                section = 'common'

            if not exists(config_path):
                mesg = f"{self.prog}: error: no such file or directory: '{config_path}'"
                print(mesg, file=sys.stderr)
                sys.exit(2)

            config = ConfigParser(default_section=None, empty_lines_in_values=False)
            config.read(config_path)

            if section != 'common' and not config.has_section('common'):
                self.__override_defaults(parser, config, section)
                return

            self.__override_defaults(parser, config, 'common')
            if section != 'common':
                self.__override_defaults(parser, config, section)


    def __override_defaults(self, parser, config, section):

        if not config.has_section(section):
            mesg = f"{self.prog}: error: no such section in config: '{section}'"
            print(mesg, file=sys.stderr)
            sys.exit(2)

        opt = dict()

        try:
            for key in ('degree', 'width', 'height', 'max_iters'):
                if config.has_option(section, key):
                    opt[key] = int(config.get(section, key))

            for key in ('tolerance', 'gamma'):
                if config.has_option(section, key):
                    opt[key] = float(config.get(section, key))
        except ValueError as e:
            parser.error(f"config section '{section}': {e}")

        for key in ('output', 'num_threads'):
            if config.has_option(section, key):
                opt[key] = str(config.get(section, key))

        if len(opt):
            parser.set_defaults(**opt)


def _is_number(arg):

    try:
        float(arg)
    except ValueError:
        return False

    return True
