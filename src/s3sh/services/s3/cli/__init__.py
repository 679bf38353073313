from s3sh.services.s3.cli import buckets, objects

bucket_app = buckets.app
object_app = objects.app
