"""Line and document filters: count, cut, grep, head, hash, jsonarray, pager, tail and markdown."""