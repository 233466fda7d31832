from xapdesk.main import main

main()
