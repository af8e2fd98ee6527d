# Part of DynamicProxy, see License file for full copyright and licensing details.

from .cli import main

if __name__ == "__main__":
    main()
