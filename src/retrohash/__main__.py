from retrohash.app import main

main()
