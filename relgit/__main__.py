from relgit.cli.app import main

main()
