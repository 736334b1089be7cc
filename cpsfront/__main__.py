from cpsfront.cmdline import main

main()
