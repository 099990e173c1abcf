from rkn_checker.cli import main

main()
