# -*- coding: utf-8 -*-

from veracode_flaws.cli import main

if __name__ == "__main__":
	main()
