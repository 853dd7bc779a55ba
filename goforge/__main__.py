from goforge.cli import main

main()
