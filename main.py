from rich.pretty import pprint

from arglet import *


parser = ArgumentParser(shell=True)
parser.add_argument("-n", "--name", nargs=1)
parser.add_argument("-v", "--verbose")
parser.add_argument("--inputs", nargs="+", optional=False)
parser.add_final_argument("output", nargs="*", optional=True)


if __name__ == '__main__':
    parser.parse()
    parser.print_usage()
    pprint(parser.namespace())
