from gcloud_ssh.gcloud_ssh import main

main()
