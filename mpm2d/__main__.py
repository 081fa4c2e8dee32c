from mpm2d.main import main

main()
