from cltodo.cli.main import main

main()
