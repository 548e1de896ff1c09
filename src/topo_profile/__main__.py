from topo_profile.cli import main

main()
