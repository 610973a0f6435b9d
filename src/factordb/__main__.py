from factordb.cli import main

main()
