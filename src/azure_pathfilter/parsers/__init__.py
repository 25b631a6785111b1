"""Line-oriented extractors for .csproj and azure-pipelines.yml descriptors."""
