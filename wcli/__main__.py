from wcli.main import main

main()
