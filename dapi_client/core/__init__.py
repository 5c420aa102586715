SERVICE_NAME = "dapi_client"
