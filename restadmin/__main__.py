from restadmin.main import main

main()
