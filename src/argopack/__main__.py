from argopack import cli

cli.main()
